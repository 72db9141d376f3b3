"""Infrastructure: document stores, repositories, security."""
