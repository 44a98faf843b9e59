"""
Setup script for surveyor.

Surveyor is a terminal tool for building surveys and tests out of six
question kinds (true/false, multiple choice, short answer, essay, date and
matching), collecting responses, tabulating them and grading tests.

The 'surveyor' command opens the interactive menus; its 'survey' and
'test' subcommands run single operations.
"""

from setuptools import find_namespace_packages, setup

setup(
    name="surveyor-cli",
    version="1.0.0",
    description="Terminal surveys and tests with tabulation and automatic grading",
    long_description=open("README.md", encoding="utf-8").read() if __import__("os").path.exists("README.md") else "",
    long_description_content_type="text/markdown",
    # src/ is a namespace package (no __init__.py), imported as `src.*`
    packages=find_namespace_packages(include=["src", "src.*"]),
    py_modules=["config"],
    python_requires=">=3.10",
    install_requires=[
        # CLI
        "typer>=0.9.0",
        "rich>=13.0.0",
        # Config & Validation
        "pydantic>=2.0.0",
        "pydantic-settings>=2.0.0",
        # Logging
        "loguru>=0.7.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
            "ruff>=0.1.0",
            "mypy>=1.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "surveyor=src.cli.main:run",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Environment :: Console",
        "Intended Audience :: Education",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Education",
        "Topic :: Education :: Testing",
    ],
    keywords="survey test quiz grading tabulation cli",
)
