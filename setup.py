from setuptools import find_packages, setup

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

requirements = [
    "yt-dlp>=2024.1.1",
    "httpx>=0.25.0",
    "PyYAML>=6.0",
    "tenacity>=8.2.0",
    "tqdm>=4.66.0",
    "jellyfish>=1.0.0",
]

test_requirements = [
    "pytest>=7.4.0",
    "pytest-asyncio>=0.21.0",
]

setup(
    name="youtube-tracklist",
    version="1.0.0",
    author="Tracklist Team",
    description="Extract song lists from YouTube comments and match them against music catalogs",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
    python_requires=">=3.9",
    install_requires=requirements,
    extras_require={"test": test_requirements},
)
