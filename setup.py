"""
Setup script for safeprep.

safeprep builds practice exams and lesson quizzes for SAFe Scrum Master
certification prep. It serves three roles:

1. Exam Simulation - Domain-weighted 45-question draws
2. Lesson Quizzes - Per-lesson and per-section question pools
3. Question Bank QA - Integrity checks for built-in and external questions

The 'safeprep' command is the primary entry point.
"""

from setuptools import find_packages, setup

setup(
    name="safeprep",
    version="1.0.0",
    description="Exam and lesson quiz builder for SAFe Scrum Master certification prep",
    long_description=open("README.md", encoding="utf-8").read() if __import__("os").path.exists("README.md") else "",
    long_description_content_type="text/markdown",
    packages=find_packages(include=["safeprep", "safeprep.*"]),
    py_modules=["config"],
    package_data={"safeprep.data": ["*.json"]},
    include_package_data=True,
    python_requires=">=3.10",
    install_requires=[
        # CLI
        "typer>=0.9.0",
        "rich>=13.0.0",
        # Config & Validation
        "pydantic>=2.6.0",
        "pydantic-settings>=2.0.0",
        # HTTP
        "httpx>=0.25.0",
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
            "safeprep=safeprep.cli.main:main",
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
    keywords="exam quiz certification safe scrum education",
)
