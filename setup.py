"""Setup script for autocurry."""
from setuptools import setup, find_packages  # type: ignore
import re

with open('autocurry/__init__.py') as f:
    version = re.search(r"^version = '([^']+)'", f.read(), re.M).group(1)

setup(
    name='autocurry',
    version=version,
    description='Automatic currying, partial application and composition for Python callables',  # noqa
    long_description=open('README.md').read(),
    long_description_content_type='text/markdown',
    license='MIT',
    classifiers=[
        'Development Status :: 3 - Alpha',
        'Intended Audience :: Developers',
        'Topic :: Software Development :: Libraries',
        'License :: OSI Approved :: MIT License',
        'Programming Language :: Python :: 3.12',
    ],
    keywords='currying partial-application composition functional',
    packages=find_packages(include=['autocurry', 'autocurry.*']),  # type: ignore
    python_requires='>=3.12',
    install_requires=[
        'typing-extensions>=4',
    ],
    extras_require={
        'test': [
            'coverage>=6.4.4',
            'hypothesis>=6',
            'pytest>=7',
        ],
        'dev': ['axblack==20220330', 'mypy>=1.1.1', 'pre-commit>=2.6.0,<3'],
    },
    entry_points={
        'console_scripts': ['autocurry=autocurry.__main__:console_main'],
    },
)
