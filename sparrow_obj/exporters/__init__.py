from sparrow_obj.exporters.obj import MTL_KEYS, ObjExporter, face_format, save

__all__ = [
    "MTL_KEYS",
    "ObjExporter",
    "face_format",
    "save",
]
