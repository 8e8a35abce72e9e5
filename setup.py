from setuptools import setup, find_packages

setup(
    name="gridpuzzles",
    version="1.0.0",
    description="Constraint-propagation and backtracking solvers for Sudoku, Queens, Zip and Tango",
    author="robomotic",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.8",
    install_requires=[
        "numpy>=1.21.0",
    ],
    extras_require={
        "dev": ["pytest>=7.0.0"],
    },
    entry_points={
        "console_scripts": [
            "gridpuzzles=gridpuzzles.cli:main",
        ],
    },
)
