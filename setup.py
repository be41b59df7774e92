# setup.py
from setuptools import setup, find_packages

setup(
    name="site_preview",
    version="0.1.0",
    description="Async page metadata resolver: title, hero image and favicon",
    packages=find_packages(include=["site_preview", "site_preview.*"]),
    install_requires=[
        "aiohttp>=3.9",
        "beautifulsoup4>=4.12",
        "pydantic>=2.0",
        "PyYAML>=6.0",
        "click>=8.1",
        "Pillow>=10.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.4,<9",
            "pytest-asyncio>=0.23",
        ],
    },
    entry_points={
        "console_scripts": [
            "site-preview=site_preview.cli:cli",
        ],
    },
    python_requires=">=3.11",
)
