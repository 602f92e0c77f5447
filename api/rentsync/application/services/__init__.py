"""
Servicios de aplicacion: proyeccion de payloads y escritura de documentos.
"""
