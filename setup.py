"""Setup configuration for the Qopikun inspection room."""
from setuptools import setup, find_packages

setup(
    name="qopikun-inspection-room",
    version="0.1.0",
    description="Inspection record evaluation and sign-off workflow for digital quality inspections",
    author="Qopikun Engineering",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    python_requires=">=3.10",
    install_requires=[
        "pydantic>=2.5.0",
        "httpx>=0.25.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.4.0",
            "pytest-cov>=4.1.0",
            "pytest-mock>=3.12.0",
            "pytest-asyncio>=0.23.0",
            "black>=23.11.0",
            "ruff>=0.1.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "qopikun=qopikun.main:main",
        ],
    },
)
