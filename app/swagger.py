# app/swagger.py

def _id_param(name="id"):
    return {"name": name, "in": "path", "required": True, "type": "string"}


def _body(ref):
    return {"in": "body", "name": "payload", "schema": {"$ref": f"#/definitions/{ref}"}, "required": True}


def _list_of(ref):
    return {"200": {"description": "OK", "schema": {"type": "array", "items": {"$ref": f"#/definitions/{ref}"}}}}


def _crud(tag, ref, create_ref, with_update=True, with_delete=True, store_only=False):
    """Collection + item paths shared by most resources."""
    note = " Requires the document store (400 in JSON fallback mode)." if store_only else ""
    collection = {
        "get": {"tags": [tag], "summary": f"List {tag.lower()}", "responses": _list_of(ref)},
        "post": {
            "tags": [tag], "summary": f"Create {ref}", "description": note.strip(),
            "parameters": [_body(create_ref)],
            "responses": {"201": {"schema": {"$ref": f"#/definitions/{ref}"}}, "400": {"$ref": "#/definitions/Error"}},
        },
    }
    item = {
        "get": {
            "tags": [tag], "summary": f"Get {ref}", "parameters": [_id_param()],
            "responses": {"200": {"schema": {"$ref": f"#/definitions/{ref}"}}, "404": {"$ref": "#/definitions/NotFound"}},
        },
    }
    if with_update:
        item["put"] = {
            "tags": [tag], "summary": f"Update {ref} (partial merge)", "description": note.strip(),
            "parameters": [_id_param(), _body(ref)],
            "responses": {"200": {"schema": {"$ref": f"#/definitions/{ref}"}}, "400": {"$ref": "#/definitions/Error"}, "404": {"$ref": "#/definitions/NotFound"}},
        }
    if with_delete:
        item["delete"] = {
            "tags": [tag], "summary": f"Delete {ref}", "description": note.strip(),
            "parameters": [_id_param()],
            "responses": {"200": {"schema": {"$ref": "#/definitions/Message"}}, "404": {"$ref": "#/definitions/NotFound"}},
        }
    return collection, item


def _filtered(tag, ref, param, summary):
    return {"get": {"tags": [tag], "summary": summary, "parameters": [_id_param(param)], "responses": _list_of(ref)}}


def _slot_paths(prefix, tag, post_summary, exhausted_code):
    return {
        f"/api/{prefix}": {
            "get": {"tags": [tag], "summary": "List slots (empty in JSON fallback mode)", "responses": _list_of("Slot")},
            "post": {
                "tags": [tag], "summary": post_summary,
                "parameters": [_body("SlotCreate")],
                "responses": {"201": {"schema": {"$ref": "#/definitions/Message"}}, "400": {"$ref": "#/definitions/Error"}},
            },
        },
        f"/api/{prefix}/assign": {
            "post": {
                "tags": [tag], "summary": "Claim the lowest-numbered free slot",
                "parameters": [_body("SlotAssign")],
                "responses": {
                    "200": {"schema": {"$ref": "#/definitions/SlotAssignment"}},
                    "400": {"$ref": "#/definitions/Error"},
                    exhausted_code: {"description": "Pool exhausted", "schema": {"$ref": "#/definitions/Error"}},
                },
            },
        },
        f"/api/{prefix}/reset": {
            "get": {"tags": [tag], "summary": "Delete every slot", "responses": {"200": {"schema": {"$ref": "#/definitions/ResetResult"}}}},
        },
        f"/api/{prefix}/{{id}}": {
            "get": {"tags": [tag], "summary": "Get slot", "parameters": [_id_param()],
                    "responses": {"200": {"schema": {"$ref": "#/definitions/Slot"}}, "404": {"$ref": "#/definitions/NotFound"}}},
            "delete": {"tags": [tag], "summary": "Release slot (unconditional)", "parameters": [_id_param()],
                       "responses": {"200": {"schema": {"$ref": "#/definitions/Message"}}}},
        },
    }


_vehicles, _vehicle = _crud("Vehicles", "Vehicle", "Vehicle")
_clients, _client = _crud("Clients", "Client", "Client")
_owners, _owner = _crud("Owners", "Owner", "Owner")
_repairs, _repair = _crud("Repairs", "Repair", "RepairCreate")
_completions, _completion = _crud("RepairCompletions", "RepairCompletion", "RepairCompletion", store_only=True)
_parts, _part = _crud("Parts", "Part", "Part")
_part_types, _part_type = _crud("PartTypes", "PartType", "PartType")
_payments, _payment = _crud("Payments", "Payment", "Payment", with_update=False)
_notifications, _notification = _crud("Notifications", "Notification", "Notification", with_update=False)

_completions["delete"] = {
    "tags": ["RepairCompletions"], "summary": "Delete every repair completion (batch)",
    "responses": {"200": {"schema": {"$ref": "#/definitions/ResetResult"}}, "400": {"$ref": "#/definitions/Error"}},
}

swagger_spec = {
  "swagger": "2.0",
  "info": {
    "title": "Repair Shop API",
    "version": "1.0.0",
    "description": "Vehicles, clients, repairs, catalogs, payments, notifications and the repair/waiting slot pools."
  },
  "basePath": "/",
  "schemes": ["https", "http"],
  "consumes": ["application/json"],
  "produces": ["application/json"],

  "tags": [
    {"name": "Vehicles", "description": "Vehicle CRUD"},
    {"name": "Clients", "description": "Client CRUD"},
    {"name": "Owners", "description": "Owner CRUD"},
    {"name": "Repairs", "description": "Repairs & status transition"},
    {"name": "RepairCompletions", "description": "Per-part repair completion dates"},
    {"name": "Parts", "description": "Part catalog"},
    {"name": "PartTypes", "description": "Part type catalog"},
    {"name": "VehicleTypes", "description": "Vehicle type catalog (read-only)"},
    {"name": "Payments", "description": "Payment history"},
    {"name": "Notifications", "description": "Vehicle notifications"},
    {"name": "RepairSlots", "description": "Repair bays"},
    {"name": "WaitingSlots", "description": "Waiting positions"},
    {"name": "Health", "description": "Store mode & counts"}
  ],

  "paths": {
    "/api/vehicles": _vehicles,
    "/api/vehicles/{id}": _vehicle,
    "/api/vehicles/client/{client_id}": _filtered("Vehicles", "Vehicle", "client_id", "Vehicles of a client"),
    "/api/clients": _clients,
    "/api/clients/{id}": _client,
    "/api/owners": _owners,
    "/api/owners/{id}": _owner,

    "/api/repairs": _repairs,
    "/api/repairs/{id}": _repair,
    "/api/repairs/vehicle/{vehicle_id}": _filtered("Repairs", "Repair", "vehicle_id", "Repairs of a vehicle"),
    "/api/repairs/status/in-progress": {
      "put": {"tags": ["Repairs"], "summary": "Set every repair to IN_PROGRESS", "responses": {"200": {"schema": {"$ref": "#/definitions/BulkResult"}}}},
      "get": {"tags": ["Repairs"], "summary": "Browser alias of the PUT", "responses": {"200": {"schema": {"$ref": "#/definitions/BulkResult"}}}}
    },

    "/api/repair-completions": _completions,
    "/api/repair-completions/{id}": _completion,
    "/api/repair-completions/repair/{repair_id}": _filtered("RepairCompletions", "RepairCompletion", "repair_id", "Completions of a repair"),
    "/api/repair-completions/reset": {
      "get": {"tags": ["RepairCompletions"], "summary": "Empty the collection (both modes)", "responses": {"200": {"schema": {"$ref": "#/definitions/ResetResult"}}}}
    },
    "/api/finReparation": {
      "get": {"tags": ["RepairCompletions"], "summary": "Alias of GET /api/repair-completions", "responses": {"200": {"schema": {"type": "array", "items": {"$ref": "#/definitions/RepairCompletion"}}}}}
    },

    "/api/parts": _parts,
    "/api/parts/{id}": _part,
    "/api/part-types": _part_types,
    "/api/part-types/{id}": _part_type,
    "/api/vehicle-types": {"get": {"tags": ["VehicleTypes"], "summary": "List vehicle types", "responses": _list_of("VehicleType")}},
    "/api/vehicle-types/{id}": {
      "get": {"tags": ["VehicleTypes"], "summary": "Get vehicle type", "parameters": [_id_param()],
              "responses": {"200": {"schema": {"$ref": "#/definitions/VehicleType"}}, "404": {"$ref": "#/definitions/NotFound"}}}
    },

    "/api/payments": _payments,
    "/api/payments/{id}": _payment,
    "/api/payments/client/{client_id}": _filtered("Payments", "Payment", "client_id", "Payments of a client"),
    "/api/payments/repair/{repair_id}": _filtered("Payments", "Payment", "repair_id", "Payments of a repair"),

    "/api/notifications": _notifications,
    "/api/notifications/{id}": _notification,
    "/api/notifications/unread": {"get": {"tags": ["Notifications"], "summary": "Unread notifications", "responses": _list_of("Notification")}},
    "/api/notifications/vehicle/{vehicle_id}": _filtered("Notifications", "Notification", "vehicle_id", "Notifications of a vehicle"),
    "/api/notifications/{id}/read": {
      "put": {"tags": ["Notifications"], "summary": "Mark as read", "parameters": [_id_param()],
              "responses": {"200": {"schema": {"$ref": "#/definitions/Notification"}}, "404": {"$ref": "#/definitions/NotFound"}}}
    },

    **_slot_paths("slotReparation", "RepairSlots", "Add a slot document under a generated id", "400"),
    **_slot_paths("slotAttente", "WaitingSlots", "Claim the first free waiting position with the given start time", "409"),

    "/api/health": {
      "get": {"tags": ["Health"], "summary": "Store mode and collection counts", "responses": {"200": {"schema": {"$ref": "#/definitions/Health"}}}}
    }
  },

  "definitions": {
    "Error": {"type": "object", "properties": {"error": {"type": "string"}}},
    "NotFound": {"type": "object", "properties": {"error": {"type": "string", "example": "Vehicle not found"}}},
    "Message": {"type": "object", "properties": {"message": {"type": "string"}}},
    "BulkResult": {"type": "object", "properties": {"message": {"type": "string"}, "mode": {"type": "string"}, "modified": {"type": "integer"}}},
    "ResetResult": {"type": "object", "properties": {"message": {"type": "string"}, "mode": {"type": "string"}, "deleted": {"type": "integer"}}},

    "Ref": {"type": "object", "required": ["id"], "properties": {"id": {"type": "string"}}},

    "Vehicle": {
      "type": "object",
      "required": ["make", "model"],
      "properties": {
        "id": {"type": "string", "readOnly": True},
        "make": {"type": "string"},
        "model": {"type": "string"},
        "year": {"type": "integer"},
        "license_plate": {"type": "string"},
        "vin": {"type": "string"},
        "client_id": {"type": "string"},
        "owner_id": {"type": "string"}
      }
    },
    "Client": {
      "type": "object",
      "required": ["first_name", "last_name"],
      "properties": {
        "id": {"type": "string", "readOnly": True},
        "first_name": {"type": "string"},
        "last_name": {"type": "string"},
        "phone": {"type": "string"},
        "email": {"type": "string", "format": "email"},
        "address": {"type": "string"}
      }
    },
    "Owner": {
      "type": "object",
      "required": ["first_name", "last_name"],
      "properties": {
        "id": {"type": "string", "readOnly": True},
        "first_name": {"type": "string"},
        "last_name": {"type": "string"},
        "phone": {"type": "string"},
        "email": {"type": "string", "format": "email"},
        "vehicle_ids": {"type": "array", "items": {"type": "string"}}
      }
    },
    "Repair": {
      "type": "object",
      "properties": {
        "id": {"type": "string", "example": "REP001", "readOnly": True},
        "vehicle": {"$ref": "#/definitions/Ref"},
        "description": {"type": "string"},
        "status": {"type": "string", "enum": ["PENDING", "IN_PROGRESS", "DONE"]},
        "client_id": {"type": "string"},
        "estimated_cost": {"type": "number"}
      }
    },
    "RepairCreate": {
      "type": "object",
      "required": ["vehicle", "description"],
      "properties": {
        "vehicle": {"$ref": "#/definitions/Ref"},
        "description": {"type": "string"},
        "status": {"type": "string", "enum": ["PENDING", "IN_PROGRESS", "DONE"]}
      }
    },
    "RepairCompletion": {
      "type": "object",
      "required": ["repair", "part", "completed_at"],
      "properties": {
        "id": {"type": "string", "readOnly": True},
        "repair": {"$ref": "#/definitions/Ref"},
        "part": {"$ref": "#/definitions/Ref"},
        "completed_at": {"type": "string", "format": "date-time"}
      }
    },
    "Part": {
      "type": "object",
      "required": ["name"],
      "properties": {
        "id": {"type": "string", "example": "PRT001", "readOnly": True},
        "name": {"type": "string"},
        "part_type_id": {"type": "string"},
        "price": {"type": "number"},
        "repair_minutes": {"type": "integer"}
      }
    },
    "PartType": {
      "type": "object",
      "required": ["name"],
      "properties": {
        "id": {"type": "string", "example": "PTY001", "readOnly": True},
        "name": {"type": "string"},
        "description": {"type": "string"}
      }
    },
    "VehicleType": {"type": "object", "properties": {"id": {"type": "string"}, "name": {"type": "string"}}},
    "Payment": {
      "type": "object",
      "required": ["repair_id", "client_id", "amount"],
      "properties": {
        "id": {"type": "string", "readOnly": True},
        "repair_id": {"type": "string"},
        "client_id": {"type": "string"},
        "amount": {"type": "number"},
        "method": {"type": "string", "enum": ["cash", "card", "transfer", "check"]},
        "paid_at": {"type": "string", "format": "date-time"}
      }
    },
    "Notification": {
      "type": "object",
      "required": ["vehicle_id", "message"],
      "properties": {
        "id": {"type": "string", "readOnly": True},
        "vehicle_id": {"type": "string"},
        "title": {"type": "string"},
        "message": {"type": "string"},
        "read": {"type": "boolean"}
      }
    },

    "Slot": {
      "type": "object",
      "properties": {
        "id": {"type": "string", "example": "1"},
        "slot_id": {"type": "integer"},
        "repair_id": {"type": "string"},
        "start_time": {"type": "string", "format": "date-time"},
        "created_at": {"type": "string", "format": "date-time"}
      }
    },
    "SlotCreate": {
      "type": "object",
      "required": ["repair_id", "start_time"],
      "properties": {"repair_id": {"type": "string"}, "start_time": {"type": "string", "format": "date-time"}}
    },
    "SlotAssign": {
      "type": "object",
      "required": ["repair_id"],
      "properties": {"repair_id": {"type": "string"}, "start_time": {"type": "string", "format": "date-time"}}
    },
    "SlotAssignment": {
      "type": "object",
      "properties": {
        "message": {"type": "string"},
        "slot_number": {"type": "integer"},
        "slot_id": {"type": "string"},
        "repair_id": {"type": "string"}
      }
    },

    "Health": {
      "type": "object",
      "properties": {
        "status": {"type": "string"},
        "mode": {"type": "string", "enum": ["firestore", "json"]},
        "firestore_connected": {"type": "boolean"},
        "data_available": {"type": "object", "additionalProperties": {"type": "integer"}}
      }
    }
  }
}
