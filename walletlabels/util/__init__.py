"""Small helpers shared across walletlabels."""
