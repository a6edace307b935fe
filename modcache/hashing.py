import hashlib


def source_code_hash(filename: str, source_code: str) -> str:
    """
    Compute the compile cache key for a module.

    The key is the SHA-1 of the UTF-8 filename bytes followed directly by the
    UTF-8 source bytes, as 40 lowercase hex characters.

    Examples:
        source_code_hash("hello.ts", "1+2") -> "a3e29aece8d35a19bf9da2bb1c086af71fb36ed5"
    """
    digest = hashlib.sha1()
    digest.update(filename.encode("utf-8"))
    digest.update(source_code.encode("utf-8"))
    return digest.hexdigest()
