# setup.py
from setuptools import setup, find_packages

setup(
    name="slope_field",
    version="0.1.0",
    description="Compile y' = f(x, y) from text and plot its slope field and Euler solution curves",
    packages=find_packages(exclude=("tests", "tests.*")),
    python_requires=">=3.10",
    install_requires=[
        "sympy",
        "matplotlib",
        "pillow",
        "numpy",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "slope-field = slope_field.cli:main",
        ],
    },
)
