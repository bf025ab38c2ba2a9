from setuptools import setup, find_packages

setup(
    name="chart-agent",
    version="0.1.0",
    packages=find_packages(exclude=['tests', 'tests.*', 'scripts', 'public', '.pytest_cache']),
    install_requires=[
        "langchain-core>=0.3.0",
        "langchain-openai>=0.2.0",
        "openai>=1.0.0",
        "pydantic>=2.0.0",
        "python-dotenv>=1.0.0",
        "fastapi>=0.109.0",
        "uvicorn>=0.27.0",
        "slowapi>=0.1.8",
        "python-multipart>=0.0.6",
        "plotly>=5.0.0",
        "pandas>=2.0.0",
        "openpyxl>=3.1.0",
        "xlrd>=2.0.1",
        "matplotlib>=3.7.0",
        "click>=8.1.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0.0",
            "pytest-asyncio>=0.21.0",
            "pytest-mock>=3.10.0",
            "httpx>=0.25.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "chart-agent=chart_agent.cli:main",
            "chart-agent-server=chart_agent.server:main",
            "chart-agent-evals=chart_agent.evals.runner:main",
        ],
    },
    python_requires=">=3.11",
)
