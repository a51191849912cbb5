from setuptools import setup

desc = '''\
Typed asynchronous client of the pixiv web ajax API.\
'''

setup(
    name="pxvapi",
    version="0.1.0",
    description=desc,
    author="KIodine",
    license="MIT",
    packages=["pxvapi"],
    python_requires=">=3.8",
    install_requires=[
        "aiohttp",
    ],
    extras_require={
        "test": [
            "pytest",
            "pytest-asyncio",
        ],
    },
    zip_safe=False
)
