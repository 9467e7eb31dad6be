# setup.py
from setuptools import setup, find_packages

setup(
    name="objmesh",
    version="1.0.0",
    description="Wavefront OBJ/MTL loader producing numpy mesh buffers",
    packages=find_packages(include=["objmesh", "objmesh.*"]),
    install_requires=[
        "numpy>=1.20.0",
        "Pillow>=9.0.0",
        "numba>=0.55.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": ["objmesh=objmesh.cli:main"],
    },
)
