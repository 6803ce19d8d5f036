"""GemForge setup - mint, mine and forge collectible gems."""
from setuptools import setup, find_packages

setup(
    name="gemforge",
    version="0.1.0",
    description="GemForge: collectible gem lifecycle engine with receipts",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.10",
    install_requires=[
        "click>=8.0",
        "blake3>=0.3",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "gem=gemforge.cli.main:cli",
        ],
    },
)
