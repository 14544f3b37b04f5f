"""
setup.py configuration script for inventory_sync project.

A continuous inventory reconciliation service that keeps storefront
variant stock, price and cost in line with the ERP catalog.
"""

import datetime
import sys

from setuptools import find_packages, setup

# Add src to path to import local module
sys.path.append("./src")

import inventory_sync  # noqa: E402

local_version = datetime.datetime.now(datetime.timezone.utc).strftime("%Y%m%d.%H%M%S")

setup(
    name="inventory_sync",
    version=inventory_sync.__version__ + "+" + local_version,
    description="Continuous ERP to storefront inventory reconciliation",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    packages=find_packages(where="./src"),
    package_dir={"": "src"},
    entry_points={
        "console_scripts": [
            "inventory-sync=inventory_sync.main:main",
        ],
    },
    install_requires=[
        "pydantic>=2.0.0",
        "pyyaml>=6.0",
        "requests>=2.28.0",
        "structlog>=22.0.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-mock>=3.10.0",
            "black>=23.0.0",
            "isort>=5.12.0",
            "flake8>=6.0.0",
            "mypy>=1.0.0",
            "coverage>=7.0.0",
        ],
        "test": [
            "pytest>=7.0.0",
            "pytest-mock>=3.10.0",
            "coverage>=7.0.0",
        ],
    },
    python_requires=">=3.8",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
    ],
)
