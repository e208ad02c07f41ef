"""Export of extracted stickers: PNG files, zip archive and manifest."""
