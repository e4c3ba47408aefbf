# setup.py
from setuptools import setup, find_packages

setup(
    name="objmesh",
    version="1.0.0",
    description="Wavefront OBJ to renderer-ready mesh converter",
    packages=find_packages(include=["objmesh", "objmesh.*"]),
    install_requires=[
        "numpy>=1.20.0",
        "numba>=0.55.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
)
