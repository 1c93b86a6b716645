"""
Job Scraper Agent.

Core components:
- agents: Agent client, tool dispatcher, search workflow
- tools: Search providers and multi-source job search
- api: HTTP entry point
"""
