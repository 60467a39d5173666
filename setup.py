"""Setup configuration for qualite."""

from setuptools import setup, find_packages

setup(
    name="qualite",
    version="0.1.0",
    description="Run a quality tool on a selection of files, in parallel",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.9",
    install_requires=[
        "click>=8.1.0",
        "pyyaml>=6.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "qualite=qualite.cli:main",
        ],
    },
)
