# Question sent with an image when the user typed nothing.
DEFAULT_QUESTION = "What is in this image?"

# The proxy does not know the real image type; the data URI is always labelled as JPEG.
IMAGE_DATA_URI_PREFIX = "data:image/jpeg;base64,"
