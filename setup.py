#!/usr/bin/env python3
"""Setup script for werewolf-game-master package."""

from setuptools import setup, find_packages

setup(
    name="werewolf-game-master",
    version="0.1.0",
    description="Phase state machine and round resolution engine for Werewolf games",
    python_requires=">=3.10",
    packages=find_packages(where=".", include=["wgm*"]),
    package_dir={"": "."},
    install_requires=[
        "numpy",
        "pandas",
        "scipy",
        "pyyaml",
        "aiohttp",
        "tenacity",
    ],
    extras_require={
        "test": [
            "pytest",
            "pytest-asyncio",
        ],
    },
)
