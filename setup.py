#!/usr/bin/env python3
"""
Setup configuration for Compresstimator.
"""

from setuptools import setup, find_packages
from pathlib import Path

# Read the contents of README file
this_directory = Path(__file__).parent
long_description = (this_directory / "README.md").read_text()

# Read requirements from requirements.txt
requirements = []
if (this_directory / "requirements.txt").exists():
    requirements = (this_directory / "requirements.txt").read_text().strip().split('\n')
    requirements = [req.strip() for req in requirements if req.strip() and not req.startswith('#')]

setup(
    name="compresstimator",
    version="1.0.0",
    author="Compresstimator Developers",
    author_email="",
    description="Estimate file compressibility by sampling blocks instead of compressing everything",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=['compressors*', 'sampling*']),
    py_modules=[
        'compresstimator',
        'compresstimate',
        'estimator_configs',
        'base_classes',
        'run_tests',
    ],
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Intended Audience :: System Administrators",
        "Topic :: System :: Archiving :: Compression",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.10",
    install_requires=requirements,
    extras_require={
        "dev": [
            "pytest>=7.0",
            "pytest-cov",
            "black",
            "flake8",
            "mypy",
            "pre-commit",
        ],
        "test": [
            "pytest>=7.0",
            "pytest-cov",
            "pytest-mock",
        ],
    },
    entry_points={
        "console_scripts": [
            "compresstimate=compresstimate:main",
            "run-compresstimator-tests=run_tests:main",
        ]
    },
    include_package_data=True,
    keywords=[
        "compression",
        "compression-ratio",
        "estimation",
        "sampling",
        "lz4",
        "zstd",
    ],
)
