"""Named constants for Fingerscan."""
