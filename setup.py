from setuptools import setup, find_packages

setup(
    name="exam-ticket-generator",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    py_modules=["main"],
    install_requires=[
        "pandas>=1.5.0",
        "openpyxl>=3.0.0",
        "python-docx>=0.8.11",
        "PyYAML>=6.0",
        "jsonschema>=4.0.0",
        "mammoth>=1.6.0",
        "beautifulsoup4>=4.11.0"
    ],
    extras_require={
        "test": [
            "pytest>=7.0"
        ]
    },
    entry_points={
        "console_scripts": [
            "ticketgen=main:cli"
        ]
    },
    description="Generate randomized exam tickets from block-structured .docx question banks",
    keywords="exam, tickets, docx, question bank, education",
    python_requires=">=3.9",
)
