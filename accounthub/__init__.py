"""accounthub: account provisioning backend with billing-identity linkage."""
