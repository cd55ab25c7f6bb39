#setup.py:

from setuptools import setup

setup(
    name="narinfo",
    version="0.1.0",
    description="Parser and validator for Nix binary cache narinfo records.",
    packages=["narinfo"],
    python_requires=">=3.8",
    install_requires=[
        "starlette",
        "hypercorn",
        "uvloop>=0.18",
    ],
    extras_require={
        "test": ["pytest", "httpx"],
    },
    entry_points={
        "console_scripts": ["narinfo=narinfo.__main__:run"],
    },
)
