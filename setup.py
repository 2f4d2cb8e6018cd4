from setuptools import setup, find_packages

setup(
    name="shipwright",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    include_package_data=True,
    install_requires=[
        "rich",
        "requests",
        "python-dotenv",
        "toml",
        "rich-argparse",
        "pbxproj",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "shipwright=shipwright.cli:main",
        ],
    },
)
