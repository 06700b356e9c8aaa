import logging
from typing import Optional

from components.domains import DomainConfig


def is_blank(value) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    return False


class FormState:
    """
    Current field values, amenity flags and location for one valuation form.

    Writes are never validated; readiness is only checked through
    ``is_submittable`` and the payload builder.
    """

    def __init__(self, config: Optional[DomainConfig] = None):
        self.logger = logging.getLogger(FormState.__name__)
        self.config = None
        self.values = {}
        self.amenities = {}
        self.coordinate = None
        self.result = None
        self.error = None

        if config is not None:
            self.initialize(config)

    def initialize(self, config: DomainConfig):
        self.config = config
        self.values = config.defaults()
        self.amenities = {amenity_id: False for amenity_id in config.amenity_ids}
        self.logger.debug(f"Initialized form state for {config.key}")

    @property
    def initialized(self) -> bool:
        return self.config is not None

    def set_field(self, name, value):
        self.values[name] = value

    def get_field(self, name, default=None):
        return self.values.get(name, default)

    def toggle_amenity(self, amenity_id):
        if amenity_id not in self.amenities:
            raise KeyError(f"Unknown amenity: {amenity_id}")
        self.amenities[amenity_id] = not self.amenities[amenity_id]
        return self.amenities[amenity_id]

    def set_amenity(self, amenity_id, selected: bool):
        if amenity_id not in self.amenities:
            raise KeyError(f"Unknown amenity: {amenity_id}")
        self.amenities[amenity_id] = bool(selected)

    def selected_amenities(self) -> list:
        return [amenity_id for amenity_id, selected in self.amenities.items() if selected]

    def set_coordinate(self, coordinate):
        self.coordinate = coordinate

    def missing_fields(self) -> list:
        if not self.initialized:
            return []
        return [name for name in self.config.required_fields
                if is_blank(self.values.get(name))]

    def is_submittable(self) -> bool:
        if not self.initialized:
            return False
        return not self.missing_fields() and self.coordinate is not None

    def reset(self):
        """Clear the last result and error, keeping what the user entered."""
        self.result = None
        self.error = None
