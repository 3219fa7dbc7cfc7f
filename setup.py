import builtins

import setuptools
from setuptools import setup

builtins.__TEMPOBJECT_SETUP__ = True
import tempobject


def setup_package():
    with open("README.md", "r", encoding="utf-8") as f:
        readme = f.read()

    setup(
        name="tempobject",
        version=tempobject.__version__,
        packages=setuptools.find_packages(exclude=["tests", "*.tests"]),
        license="BSD",
        description="Binary payloads that move between memory and disk on demand",
        long_description=readme,
        long_description_content_type="text/markdown",
        python_requires=">=3.8",
        classifiers=[
            "Intended Audience :: Developers",
            "Programming Language :: Python :: 3",
            "Programming Language :: Python :: 3.8",
            "Programming Language :: Python :: 3.9",
            "Programming Language :: Python :: 3.10",
            "Programming Language :: Python :: 3.11",
            "Programming Language :: Python :: 3.12",
            "License :: OSI Approved",
            "Topic :: System :: Filesystems",
        ],
        install_requires=[
            "fsspec>=2024.12.0",
        ],
        extras_require={
            "test": [
                "pytest>=6.2.5",
                "black==22.3.0",
            ],
            "development": ["pre-commit==2.6.0"],
        },
    )


if __name__ == "__main__":
    setup_package()

    del builtins.__TEMPOBJECT_SETUP__
