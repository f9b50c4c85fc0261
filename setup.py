from setuptools import setup, find_packages

setup(
    name="terminal_racer",
    version="0.1.0",
    description="A terminal racing game: dodge the obstacles scrolling down the track",
    author="Your Name",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.8",
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "terminal-racer=terminal_racer.main:main",
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Environment :: Console",
        "Topic :: Games/Entertainment :: Arcade",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
)
