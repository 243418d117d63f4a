"""Gadget news batch: feed ingestion, AI enrichment, image lookup and trend flags."""
