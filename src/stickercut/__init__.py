"""stickercut: split sticker sheets into transparent-background stickers."""

__version__ = "0.1.0"
