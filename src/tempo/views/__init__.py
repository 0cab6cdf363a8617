"""View records and console rendering."""
