from setuptools import setup, find_packages

setup(
    name="blake2stream",
    version="0.1.0",
    description="Incremental, keyed BLAKE2b and BLAKE2s (RFC 7693) in pure Python, with stable hashing of Python objects and columnar data.",
    long_description=open("Readme.md", encoding="utf-8").read(),
    long_description_content_type="text/markdown",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    include_package_data=True,
    install_requires=[],
    extras_require={
        "dataframes": ["pandas"],
        "arrow": ["pyarrow"],
        "polars": ["polars"],
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "blake2s=blake2stream.cli:main",
            "blake2b=blake2stream.cli:main",
        ],
    },
    python_requires=">=3.7",
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Topic :: Security :: Cryptography",
    ],
    zip_safe=False,
)
