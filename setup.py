"""
Setup script for Tanner package
"""

from setuptools import setup, find_packages
from pathlib import Path

# Read README for long description
readme_file = Path(__file__).parent / "README.md"
long_description = readme_file.read_text(encoding="utf-8") if readme_file.exists() else ""

setup(
    name="tanner",
    version="0.1.0",
    description="Low-Density Parity-Check and CSS Code Decoding Framework",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    python_requires=">=3.8",
    install_requires=[
        "numpy>=1.21.0",
        "scipy>=1.7.0",
        "ldpc>=0.1.0",
        "pymatching>=2.0.0",
        "networkx>=2.6",
        "stim>=1.10",
        "matplotlib>=3.5.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Science/Research",
        "Topic :: Scientific/Engineering :: Physics",
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
    ],
    keywords="error correction, LDPC, belief propagation, CSS codes, quantum computing",
)
