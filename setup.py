# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="propschema",
    version="0.3.0",
    description="Extract structural prop schemas for React components from their TypeScript declarations",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["propschema*"]),
    python_requires=">=3.9",
    install_requires=[
        "tree-sitter>=0.22",
        "tree-sitter-typescript>=0.21",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        'console_scripts': [
            'propschema=propschema.main:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
