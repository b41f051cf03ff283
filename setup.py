from setuptools import setup, find_packages

setup(
    name="coup",
    version="0.1.0",
    packages=find_packages(),
    py_modules=['main'],
    python_requires=">=3.10",
    install_requires=[
        "rich>=13.0.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        'console_scripts': [
            'play=main:main',
            'mcts-viewer=coup.ai.viewer:main',
            'mcts-eval=coup.ai.eval:main',
        ],
    },
)
