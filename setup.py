from setuptools import setup, find_packages


setup(
    name="ed2k",
    version="0.1",
    packages=find_packages(),
    description="ED2K (eDonkey2000) Red/Blue file hashes with single-pass dual computation.",
    author="vercingetorx",
    install_requires=[
        "pycryptodomex>=3.23.0",
    ],
    entry_points={
        "console_scripts": [
            "ed2k=ed2k.cli:main",
        ]
    },
)
