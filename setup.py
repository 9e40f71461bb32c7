from setuptools import setup, find_packages

setup(
    name="rawproto",
    version="0.3.0",
    description="Schema-less decoder for the protobuf wire format",
    long_description=open("README.md", "r", encoding="utf-8").read(),
    long_description_content_type="text/markdown",
    license="MIT",
    entry_points={"console_scripts": ["rawproto=rawproto.cli:app"]},
    packages=find_packages(
        exclude=["tests", "*.tests", "*.tests.*"]
    ),
    python_requires=">=3.8",
    install_requires=[
        "rich",
        "typer",
    ],
    extras_require={"test": ["pytest", "hypothesis", "betterproto>=2.0.0b6"]},
    zip_safe=False,
)
