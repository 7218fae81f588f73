from setuptools import setup, find_packages

setup(
    name="statement_recon",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "pandas>=1.5",
        "numpy",
        "pydantic>=2",
    ],
    extras_require={
        "test": ["pytest"],
    },
    author="Price Hatfield",
    description="A tool for reconciling recorded household transactions against bank statements",
    python_requires=">=3.8",
)
