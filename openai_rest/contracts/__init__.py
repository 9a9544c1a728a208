from __future__ import annotations
from .common import *
from .models import *
from .uploads import FileUpload, MultipartRequest
from .chat_completion import *
from .completion import *
from .edit import *
from .embedding import *
from .image import *
from .audio import *
from .file import *
from .fine_tuning import *
from .moderation import *
from .assistant import *
from .message import *
from .thread import *
from .run import *
