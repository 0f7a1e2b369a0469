def set_keywords(obj,kw):
    """
    Utility for __init__ methods to update object state with
    keyword arguments.  Only attributes which already exist, typically
    as class-level defaults, can be set, so misspellings fail loudly.
    """
    for k in kw:
        if not hasattr(obj,k):
            raise AttributeError("Setting attribute %s failed because it doesn't exist on %s"%(k,obj))
        setattr(obj,k,kw[k])
