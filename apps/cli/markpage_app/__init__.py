"""Command-line front end for markpage."""
