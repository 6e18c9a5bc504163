# ABOUTME: wikitaxon - typed knowledge-graph facts from Wikipedia category tags
# ABOUTME: Package root; see extraction for the pipeline and main for the CLI

__version__ = "0.1.0"
