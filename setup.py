from setuptools import setup, find_packages

setup(
    name='drop_file_server',
    version='0.1.0',
    packages=find_packages(where='src'),  # 指定包的位置
    package_dir={'': 'src'},
    package_data={"drop_server.config": ["*.json"]},
    install_requires=[
        'fastapi',
        'uvicorn',
        'python-multipart',
        'pydantic>=2',
        'sqlmodel',
        'SQLAlchemy',
        'requests',
    ],
    extras_require={
        'test': ['pytest', 'httpx'],
    },
    author='zhiguo',
    author_email='zhiguoxu2004@163.com',
    description='file drop server with short public codes, and its sdk',
    long_description="",
    long_description_content_type='text/markdown',
    url='https://github.com/xxx',
    classifiers=[]
)
