# setup.py
from setuptools import setup, find_packages

setup(
    name="inequality_plane",
    version="0.1.0",
    description="Interactive linear-inequalities graphing board with a text parser and half-plane geometry",
    packages=find_packages(exclude=["tests", "tests.*"]),
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
            "inequality-plane = inequality_plane.cli:main",
        ],
    },
)
