from .codec import Codec, OpenCVCodec, PillowCodec, get_codec
from .image_repository import ImageRepository
