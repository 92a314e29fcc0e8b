from setuptools import find_packages, setup

if __name__ == "__main__":
    setup(
        name="eoskeys",
        version="0.1.0",
        description="EOSIO K1 signature codec: SIG_K1 text and 65-byte binary forms",
        packages=find_packages(where="src"),
        package_dir={"": "src"},
        python_requires=">=3.9",
        install_requires=[
            "base58>=2.1",
            "ecdsa>=0.15",
            "pycryptodomex>=3.9",
        ],
        extras_require={
            "tests": ["pytest>=7"],
        },
    )
