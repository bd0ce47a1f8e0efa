from setuptools import setup, find_packages

setup(
    name="talker",
    version="1.0.0",
    description="Two-party UDP text chat with terminal mode switching",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "colorama",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "talker = talker.client:main",
        ],
    },
    python_requires=">=3.10",
)
