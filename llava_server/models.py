import uuid
from dataclasses import dataclass, field


@dataclass
class LlavaRequest:
    prompt: str
    image: bytes
    id: str = field(default_factory=lambda: str(uuid.uuid4()))

    @property
    def image_buffer_size(self) -> int:
        return len(self.image)

    def to_summary_dict(self) -> dict:
        return {
            "id": self.id,
            "prompt": self.prompt,
            "image_buffer_size": self.image_buffer_size,
        }
