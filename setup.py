#!/usr/bin/env python3
"""Setup script for servicify."""

from setuptools import setup, find_packages
from pathlib import Path

# Read the long description from README
README = Path("README.md")
long_description = README.read_text() if README.exists() else ""

# Read version from package
version = "1.0.0"

setup(
    name="servicify",
    version=version,
    description="servicify - Turn any command into a supervised systemd service",
    long_description=long_description,
    long_description_content_type="text/markdown",
    license="MIT",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "PyYAML>=6.0",
        "Jinja2>=3.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "servicify=servicify.main:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Environment :: Console",
        "Intended Audience :: System Administrators",
        "License :: OSI Approved :: MIT License",
        "Operating System :: POSIX :: Linux",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: System :: Systems Administration",
    ],
    python_requires=">=3.10",
)
