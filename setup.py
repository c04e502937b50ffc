from setuptools import setup, find_packages


with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="fibreview",
    version="0.1.0",
    description="Progressive, URL-addressable exploration of fibre network topologies.",
    long_description=long_description,
    long_description_content_type="text/markdown",
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
    packages=find_packages(exclude=("tests", "tests.*")),
    python_requires=">=3.9",
    install_requires=["networkx", "PyYAML", "pyvis"],
    extras_require={"test": ["pytest"]},
    tests_require=["pytest", "networkx"],
    entry_points={"console_scripts": ["fibreview=fibreview.cli:main"]},
)
