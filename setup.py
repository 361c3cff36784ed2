from setuptools import setup, find_packages


with open("README.md", "r") as fh:
    long_description = fh.read()

setup(
    name="hdkeygen",
    version="0.1.0",
    author="Example Author",
    author_email="author@example.com",
    description="BIP32 / SLIP-0010 HD key derivation for secp256k1 and ed25519.",
    long_description=long_description,
    long_description_content_type="text/markdown",
    url="https://github.com/example/hdkeygen",
    packages=find_packages(),
    include_package_data=True,  # https://stackoverflow.com/a/56689053
    install_requires=[
        "coincurve>=13.0.0",
        "pynacl>=1.4.0",
        "ripemd-hash",
    ],
    extras_require={
        "test": ["pytest>=6.2"],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.7",
)
