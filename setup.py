from setuptools import setup, find_packages

setup(
    name="note_scraper",
    version="0.1.0",
    description="Structured records from social media note pages, from embedded state or meta tags",
    long_description=open("README.md", encoding="utf-8").read(),
    long_description_content_type="text/markdown",
    author="note_scraper contributors",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "beautifulsoup4>=4.12.2",
        "requests>=2.31.0",
        "urllib3>=2.0.7",
        "lxml>=4.9.3",
        "tqdm>=4.66.1",
        "jsonschema>=4.20.0",
        "PyYAML>=6.0.1"
    ],
    extras_require={
        "dev": [
            "pytest>=7.4.0",
            "pytest-cov>=4.1.0",
            "black>=23.7.0",
            "isort>=5.12.0",
            "flake8>=6.1.0",
            "mypy>=1.5.1",
            "types-requests>=2.31.0",
            "types-beautifulsoup4>=4.12.0",
            "types-PyYAML>=6.0.12",
            "types-jsonschema>=4.20.0",
        ]
    },
    entry_points={
        'console_scripts': [
            'note-scraper=note_scraper.main:main',
        ],
    },
    python_requires=">=3.8",
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Topic :: Internet :: WWW/HTTP :: Dynamic Content",
        "Topic :: Software Development :: Libraries :: Python Modules",
        "Topic :: Text Processing :: Markup :: HTML"
    ],
)
