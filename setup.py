from setuptools import find_packages, setup

NAME = "xeroxml"

setup(
    name=NAME,
    version="0.1.0",
    description="Map Xero invoices to and from their XML representation",
    package_dir={"": "src"},
    packages=find_packages("src"),
    python_requires=">=3.10",
    install_requires=[
        "lxml",
        "openpyxl",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": ["xeroxml=xeroxml.cli:main"],
    },
)
