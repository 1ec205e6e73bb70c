"""Package setup for cfapi."""

from setuptools import setup

setup(
    name="cfapi",
    version="0.1.0",
    description="Typed client for the Cloudflare v4 API",
    packages=["cfapi", "cfapi.endpoints"],
    python_requires=">=3.9",
    install_requires=[
        "httpx>=0.25.0",
        "pydantic>=2.0.0",
    ],
    extras_require={
        "test": ["pytest>=7.0.0"],
    },
)
