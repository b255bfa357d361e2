"""Adds the artifact path each file (and what it declares) is rendered to."""

from docweave.document import Document, generate_filename

PATH_ATTRIBUTE = "generated-path"

_DECLARATIONS = ("class", "interface", "function")


def generate_paths(document: Document) -> Document:
    for file_el in document.iter("file"):
        path = file_el.get("path")
        if not path:
            continue
        generated = generate_filename(path)
        file_el.set(PATH_ATTRIBUTE, generated)
        for child in file_el.iter():
            if child.tag in _DECLARATIONS:
                child.set(PATH_ATTRIBUTE, generated)
    return document
