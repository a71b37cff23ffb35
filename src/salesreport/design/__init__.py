"""Design data (notification styles)."""
