"""HTTP-triggered try-on functions (FASHN garments, KIE jewelry)."""
