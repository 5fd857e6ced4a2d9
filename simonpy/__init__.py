"""Step-wise engine for the Simon family of block ciphers."""
