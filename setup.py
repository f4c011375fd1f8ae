"""Setup configuration for release_tracker"""

from setuptools import setup, find_packages

setup(
    name="drone-release-tracker",
    version="0.1.0",
    description=(
        "CLI tool counting Drone CI production promotions per day, "
        "printed as JSON or as a calendar heatmap."
    ),
    author="Drone Release Tracker Contributors",
    author_email="",
    python_requires=">=3.10",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    install_requires=[
        "requests>=2.28.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0",
            "black>=22.0",
            "flake8>=4.0",
            "mypy>=0.950",
        ],
    },
    entry_points={
        "console_scripts": [
            "drone-release-tracker=release_tracker.main:main",
        ],
    },
)
