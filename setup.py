from setuptools import setup, find_packages

setup(
    name="heartbeat_audio",
    version="0.1.0",
    description="Heart-rate estimation from a skin-contact microphone recording",
    packages=find_packages(exclude=("tests",)),
    py_modules=["main"],
    python_requires=">=3.10",
    install_requires=[
        "numpy>=1.24",
        "scipy>=1.10",
    ],
    extras_require={
        "dev": ["pytest>=7.4"],
    },
    entry_points={
        "console_scripts": [
            "heartbeat-audio=main:main",
        ]
    },
)
