from setuptools import setup, find_packages


with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="tareconcile",
    version="0.1.0",
    description="Reconcile test reports against a master test-plan manifest.",
    long_description=long_description,
    long_description_content_type="text/markdown",
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    packages=find_packages(exclude=("tests", "tests.*")),
    package_data={"tareconcile.schemas": ["*.json"]},
    python_requires=">=3.10",
    install_requires=["PyYAML", "jsonschema"],
    extras_require={"test": ["pytest"]},
    tests_require=["pytest"],
    entry_points={"console_scripts": ["tareconcile=tareconcile.cli:main"]},
)
