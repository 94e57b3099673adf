from setuptools import find_packages, setup

setup(
    name="escpos-encoder",
    version="0.1.0",
    description="Encode ESC/POS control sequences for thermal receipt printers",
    author="Garrett Johnson",
    packages=find_packages(include=["escpos_encoder", "escpos_encoder.*"]),
    python_requires=">=3.11",
    install_requires=[
        "aioserial>=1.3.0",
        "numpy>=1.23.0",
        "Pillow>=9.2.0",
        "pyserial>=3.5",
    ],
    extras_require={
        "test": ["pytest", "pytest-asyncio"],
    },
    entry_points={
        "console_scripts": [
            "escpos-demo=escpos_encoder.main:main",
        ],
    },
)
