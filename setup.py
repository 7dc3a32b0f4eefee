from setuptools import setup, find_packages

setup(
    name="ddl2struct",
    version="0.1.0",
    description="Generate Go structs with gorm/xorm tags from MySQL CREATE TABLE statements",
    packages=find_packages(include=["ddl2struct", "ddl2struct.*"]),
    include_package_data=True,
    package_data={
        "ddl2struct": [
            "config.json",
        ]
    },
    python_requires=">=3.8",
    install_requires=[
        "sqlglot>=30.23",
    ],
    extras_require={
        "test": [
            "pytest",
        ],
    },
    entry_points={
        "console_scripts": [
            "ddl2struct = ddl2struct.cli:main",
        ],
    },
)
