# Nombre de archivo: __init__.py
# Ubicación de archivo: tests/__init__.py
# Descripción: Paquete de pruebas (permite importar utilidades compartidas como tests.multipart_utils)
