"""
Setup script for brokerextract

Allows editable install for CLI and plugin integration:
    pip install -e .

This ensures brokerextract modules (parsers, parsers_core, utils) are importable from other projects.
"""

from setuptools import setup, find_packages

# Use include pattern to ensure all subpackages (like parsers) are included
setup(
    name="brokerextract",
    version="0.1.0",
    packages=find_packages(include=["brokerextract", "brokerextract.*"]),
    install_requires=[
        "pandas>=2.0.0",
        "PyYAML>=6.0.0",
        "pydantic>=2.0.0",
        "PyPDF2>=3.0.0",
        "click>=8.0.0",
        "rich>=13.0.0",
        "python-dotenv>=1.0.0",
    ],
    extras_require={
        "test": ["pytest>=7.0.0"],
    },
    entry_points={
        "console_scripts": [
            "brokerextract=brokerextract.cli:cli",
        ],
    },
    author="Broker Extract Team",
    description="Extract normalized activity records from broker transaction PDFs (parsers, registry, CLI)",
    include_package_data=True,
)
