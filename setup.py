# setup.py
from setuptools import setup, find_packages

setup(
    name="cashboard",
    version="0.1.0",
    description="An in-memory personal finance ledger with a CLI and web dashboard",
    packages=find_packages(exclude=["tests", "tests.*"]),
    package_data={"finance_dashboard": ["web_ui/*"]},
    python_requires=">=3.9",
    install_requires=[
        "click>=7.0",
        "pyyaml>=5.3",
        "pandas>=1.1",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "cashboard=finance_dashboard.cli:main",
            "cashboard-web=finance_dashboard.web:main",
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
