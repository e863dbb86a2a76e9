#!/usr/bin/env python3

from setuptools import setup, find_packages

setup(
    name="target-features",
    version="0.1.0",
    description="Database of per-architecture target features with implication-aware queries",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    package_data={
        "target_features": ["config.json5", "data/*.yaml"],
    },
    python_requires=">=3.10",
    install_requires=[
        "PyYAML>=6.0",
        "json5>=0.9",
    ],
    extras_require={
        "dev": ["pytest", "black", "mypy"],
    },
)
