"""Entity models, repositories, drafts and key-value persistence."""
