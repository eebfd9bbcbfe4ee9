"""
Setup script for learner-progression.

The progression engine tracks a learner's way through a catalog of
conversation lessons. It serves four roles:

1. Unlock Resolver - Which lessons a learner may start
2. XP & Levels - Experience earned per attempt and the derived level
3. Streaks - Daily practice streak maintenance
4. Statistics - Per-lesson attempt aggregates and mistake histograms
"""

from setuptools import find_packages, setup

setup(
    name="learner-progression",
    version="1.0.0",
    description="Learner progression engine: lesson unlocks, XP, levels, streaks and statistics",
    long_description=open("README.md", encoding="utf-8").read() if __import__("os").path.exists("README.md") else "",
    long_description_content_type="text/markdown",
    packages=find_packages(include=["progression", "progression.*"]),
    python_requires=">=3.10",
    install_requires=[
        # Database
        "sqlalchemy>=2.0.0",
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
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Intended Audience :: Education",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Education",
    ],
    keywords="learning progression xp streak education",
)
