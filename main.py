"""
Job Scraper Agent - CLI Entry Point.

Usage:
    python main.py "software engineer jobs in Austin"
    python main.py            # interactive prompt
"""

import asyncio
import sys

from dotenv import load_dotenv

load_dotenv()

from job_scraper.agents.workflow import JobSearchWorkflow
from job_scraper.config import configure_logging, get_settings
from job_scraper.exceptions import ConfigurationError, JobSearchError


def main():
    """Run the job scraper CLI."""
    settings = get_settings()
    configure_logging(settings.log_level)

    print("Job Scraper Agent")
    print("=" * 40)

    # Fail fast on missing credentials
    try:
        JobSearchWorkflow.from_settings(settings)
    except ConfigurationError as e:
        print(f"Error: {e}")
        return 1

    def search(request: str) -> str:
        """Run one workflow for a request. Every request starts a fresh conversation."""
        # New client per event loop
        workflow = JobSearchWorkflow.from_settings(settings)
        return asyncio.run(workflow.run(request))

    # One-shot mode (join args for unquoted requests)
    if len(sys.argv) > 1:
        request = " ".join(sys.argv[1:])
        try:
            print(f"\n{search(request)}")
        except JobSearchError as e:
            print(f"Error: {e}")
            return 1
        return 0

    print("Commands: /quit")
    print("-" * 40)

    while True:
        try:
            user_input = input("You: ").strip()
            if not user_input:
                continue

            if user_input.lower() == "/quit":
                break

            print(f"\nAgent: {search(user_input)}\n")

        except JobSearchError as e:
            print(f"\nError: {e}\n")
        except KeyboardInterrupt:
            break

    print("Goodbye!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
