"""
promptgate: prompt-templating HTTP gateway for hosted text generation.

Main Components:
- core: settings, logging, result values and gateway errors
- llm: generation providers and response normalization
- feeds: trend and news fetchers used to enrich prompts
- tools: request models, prompt builders and the REST router
- app: FastAPI application factory
"""

__version__ = "0.1.0"
