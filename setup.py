from setuptools import setup, find_packages

setup(
    name='registryctl',
    version='0.1.0',
    packages=find_packages(),
    include_package_data=True,
    install_requires=[
        'typer[all]',
        'kubernetes',
        'python-dotenv',
        'PyYAML',
        'jsonschema'
    ],
    extras_require={
        'test': [
            'pytest'
        ]
    },
    entry_points={
        'console_scripts': [
            'registryctl=registryctl.cli:run'
        ]
    },
    description='Choose and configure the container registry of a Kubernetes API gateway operator',
    classifiers=[
        'Programming Language :: Python :: 3',
        'Operating System :: OS Independent',
    ],
    python_requires='>=3.8',
)
