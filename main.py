"""
News Digest - scrapes Portuguese and international news homepages and
emails a ranked digest, with last night's NBA results in the morning run.

For configuration, see news_digest/config/settings.py
"""
from news_digest.cli import cli

if __name__ == "__main__":
    cli()
