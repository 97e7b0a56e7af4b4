from setuptools import find_namespace_packages, setup

setup(
    name="projclean",
    version="0.1.0",
    description="Project file cleanup and structure analysis for web-project checkouts",
    python_requires=">=3.11",
    packages=find_namespace_packages(include=["projclean", "projclean.*"]),
    install_requires=[
        "result>=0.17",
        "rich>=13.7",
        "typer>=0.12",
    ],
    extras_require={
        "test": ["pytest>=8.0"],
    },
    entry_points={
        "console_scripts": [
            "projclean=projclean.cli:main",
        ],
    },
)
