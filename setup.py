"""
Setup script for sandbox-task-runner
"""

from setuptools import setup, find_packages
import pathlib

# Read the README file
HERE = pathlib.Path(__file__).parent
README = (HERE / "README.md").read_text(encoding="utf-8")

# Basic setup configuration
setup(
    name="sandbox-task-runner",
    version="0.1.0",
    description="Run registered shell commands in ephemeral Kubernetes pods",
    long_description=README,
    long_description_content_type="text/markdown",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    include_package_data=True,
    python_requires=">=3.10",
    install_requires=[
        "fastapi==0.115.12",
        "uvicorn==0.34.3",
        "pydantic==2.11.5",
        "pydantic-settings==2.12.0",
        "structlog>=24.1.0",
        "sqlalchemy[asyncio]>=2.0.0",
        "aiomysql>=0.2.0",
        "kubernetes>=29.0.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.4.0",
            "pytest-asyncio>=0.23.0",
            "httpx>=0.27.0",
            "aiosqlite>=0.20.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "task-runner=task_runner.interfaces.rest.main:run",
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
        "License :: OSI Approved :: MIT License",
    ],
    keywords="sandbox kubernetes task execution",
)
