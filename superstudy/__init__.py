"""SuperStudy - AI study content generation gateway."""
