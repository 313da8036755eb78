from setuptools import setup, find_packages

setup(
    name="designsight_api",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*", "scripts"]),
    package_data={"designsight": ["templates/*.html"]},
    include_package_data=True,
    python_requires=">=3.9",
    install_requires=[
        "fastapi>=0.103.1",
        "uvicorn>=0.23.2",
        "python-multipart>=0.0.6",
        "pydantic>=2.5.0",
        "pydantic-settings>=2.0.3",
        "sqlalchemy>=2.0.20",
        "psycopg2-binary>=2.9.7",
        "google-cloud-storage>=2.10.0",
        "google-cloud-vision>=3.4.0",
        "pillow>=10.0.0",
        "loguru>=0.7.0",
        "python-dotenv>=1.0.0",
        "jinja2>=3.1.2",
        "weasyprint>=60.0",
        "requests>=2.31.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.4.0",
            "httpx>=0.24.1",
        ],
    },
)
