"""User-facing messages shared by the Shopify MCP tools (Spanish, as the store operates)."""

ERROR_NOT_CONFIGURED = "El servidor no está configurado para Shopify."
ERROR_UNKNOWN = "Ocurrió un error desconocido"
ERROR_UNPARSEABLE_RESPONSE = "Shopify devolvió una respuesta que no se pudo interpretar."
ERROR_DRAFT_ALREADY_COMPLETED = "El pedido borrador ya fue completado."
ERROR_UPSTREAM_UNREACHABLE = "No se pudo conectar con Shopify."

NO_DESCRIPTION = "Sin descripción"
NO_ORDERS_FOUND = "No se encontraron pedidos."
NO_DRAFT_ORDERS_FOUND = "No se encontraron pedidos borrador."
