"""Identity and access management bounded context."""
