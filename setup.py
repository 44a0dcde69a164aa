#!/usr/bin/env python3
"""
Setup script for gitbrowse
"""
from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="gitbrowse",
    version="0.1.0",
    description="A terminal-based Git commit browser",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "pygit2>=1.14",
    ],
    extras_require={
        "test": ["pytest"],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: POSIX",
        "Environment :: Console :: Curses",
        "Topic :: Software Development :: Version Control :: Git",
    ],
    python_requires=">=3.9",
    entry_points={
        "console_scripts": [
            "gitbrowse=gitbrowse.main:main",
        ],
    },
)
