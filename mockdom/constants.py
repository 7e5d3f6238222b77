"""
Namespace URIs and element name sets shared by the element, serializer and parser.
"""

HTML_NAMESPACE = 'http://www.w3.org/1999/xhtml'
SVG_NAMESPACE = 'http://www.w3.org/2000/svg'
MATHML_NAMESPACE = 'http://www.w3.org/1998/Math/MathML'
XML_NAMESPACE = 'http://www.w3.org/XML/1998/namespace'
XLINK_NAMESPACE = 'http://www.w3.org/1999/xlink'
XMLNS_NAMESPACE = 'http://www.w3.org/2000/xmlns/'

# Elements that never have an end tag
VOID_ELEMENTS = frozenset({
    'area', 'base', 'br', 'col', 'embed', 'hr', 'img', 'input',
    'link', 'meta', 'param', 'source', 'track', 'wbr',
})

# Elements whose text content is raw: not escaped on output, not parsed on input
NON_ESCAPABLE_CONTENT = frozenset({
    'style', 'script', 'xmp', 'iframe', 'noembed', 'noframes', 'plaintext', 'noscript',
})

# Elements whose whitespace is significant when pretty printing
PREFORMATTED_ELEMENTS = frozenset({'pre', 'textarea'})
