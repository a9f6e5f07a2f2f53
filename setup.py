# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="glsl2spv",
    version="1.1.0",
    description="Incremental GLSL to SPIR-V batch compiler driver",
    python_requires=">=3.9",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["glsl2spv*"]),
    install_requires=[],
    extras_require={
        "test": [
            "pytest",
        ],
    },
    entry_points={
        'console_scripts': [
            'glsl2spv=glsl2spv.main:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
