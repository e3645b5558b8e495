import setuptools

with open("README.md", "r") as fh:
    long_description = fh.read()

with open("version", "r") as fh:
    version = fh.read().strip()

setuptools.setup(
    name="libasdl",
    version=version,
    description="ASDL schema compiler and AST runtime, with a Fortran AST",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=setuptools.find_packages(),
    include_package_data=True,
    package_data={
        "libasdl.fortran": ["Fortran.asdl"],
        },
    scripts=['asdlgen'],
    install_requires=[
        "prompt_toolkit",
        ],
    extras_require={
        "test": ["pytest"],
        },
    python_requires=">=3.7",
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
)
