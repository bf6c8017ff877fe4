"""
Setup script for decrypt-pdf.

This script configures the package for installation via pip.
Supports both development and production installations.
"""

from setuptools import setup, find_packages
from pathlib import Path

# Read the README for long description
this_directory = Path(__file__).parent
long_description = (this_directory / "README.md").read_text(encoding='utf-8')

setup(
    name="decrypt-pdf",
    version="1.0.0",
    description="Decrypt password-protected PDFs using a cascading strategy (qpdf, mutool, ghostscript)",
    long_description=long_description,
    long_description_content_type="text/markdown",
    author="decrypt-pdf Contributors",
    author_email="",
    url="https://github.com/Sdaas/pdf-decrypt",
    project_urls={
        "Bug Reports": "https://github.com/Sdaas/pdf-decrypt/issues",
        "Source": "https://github.com/Sdaas/pdf-decrypt",
    },
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "pypdf>=3.0.0",
        "click>=8.0.0",
        "rich>=13.0.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "decrypt-pdf=pdf_decrypt.cli:main",
        ],
    },
    python_requires=">=3.10",
    classifiers=[
        "Development Status :: 5 - Production/Stable",
        "Intended Audience :: End Users/Desktop",
        "Intended Audience :: Developers",
        "Topic :: Office/Business",
        "Topic :: Utilities",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: 3.13",
        "Operating System :: OS Independent",
        "Environment :: Console",
    ],
    keywords="pdf decrypt password qpdf mutool ghostscript cli",
    license="MIT",
    include_package_data=True,
    zip_safe=False,
)
