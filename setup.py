# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="standards",
    version="0.1.0",
    description="Markdown line-length linter, Standards working-tree manager and data-access layer",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["standards", "standards.*"]),
    python_requires=">=3.8",
    install_requires=[
        "requests",  # Project listing client
    ],
    extras_require={
        "postgres": ["psycopg2-binary"],
        "test": ["pytest"],
    },
    entry_points={
        'console_scripts': [
            'standards=standards.main:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
