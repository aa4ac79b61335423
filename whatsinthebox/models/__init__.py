# Models package
from whatsinthebox.models.box import StorageBox
from whatsinthebox.models.item import BoxItem, RecognitionSource
