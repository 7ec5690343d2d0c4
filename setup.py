from setuptools import setup, find_packages

setup(
    name="connect4-engine",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.8",
    install_requires=[
        "numpy",
        "gymnasium",  # ConnectFourEnv
    ],
    extras_require={
        "test": ["pytest"],
    },
)
