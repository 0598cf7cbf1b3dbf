from setuptools import setup, find_packages

setup(
    name="smartcombo",
    version="0.1.0",
    description="SmartCombo - embedding-based category suggestions for smart combo boxes",
    packages=find_packages(exclude=["SmartCombo.tests", "SmartCombo.tests.*"]),
    python_requires=">=3.10",
    install_requires=[
        # Core ML/NLP
        "numpy>=1.24.0",
        "sentence-transformers>=2.2.0",
        "torch>=2.0.0",

        # Network
        "requests>=2.28.0",

        # Web framework
        "flask>=2.2.0",
        "flask-cors>=3.0.0",
        "gunicorn>=20.0.0",
        "python-dotenv>=0.19.0",

        # Validation
        "pydantic>=2.0.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0.0",
        ],
        "dev": [
            "pytest>=7.0.0",
            "black>=22.0.0",
            "flake8>=4.0.0",
            "mypy>=0.950",
        ],
    },
    entry_points={
        "console_scripts": [
            "Start-SmartComboServer=SmartCombo.app:run_server",
        ],
    },
)
