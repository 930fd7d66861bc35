from setuptools import setup, find_packages

setup(
    name="fleet_providers",
    version="0.1.0",
    packages=find_packages(),
    install_requires=[
        "httpx>=0.27.2",
        "pydantic>=2.0",
        "pydantic-core>=2.0",
        "python-dotenv>=1.0.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
            "pytest-asyncio>=0.23",
        ],
    },
    python_requires=">=3.9",
)
