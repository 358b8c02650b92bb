from setuptools import find_packages, setup

setup(
    name='raiden-kit',
    version='0.1.0',
    packages=find_packages(include=('raiden_kit', 'raiden_kit.*')),

    entry_points={
        'console_scripts': [
            'raiden-kit=raiden_kit.main:main',
        ],
    },
    python_requires='>=3.8',
    install_requires=[
        'click',
        'eth-typing',
        'eth-utils',
        'gevent',
        'pyyaml',
        'requests',
        'structlog',
        'web3>=6',
    ],
    extras_require={
        'test': [
            'pytest',
            'responses',
        ],
    },
)
