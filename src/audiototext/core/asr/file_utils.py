import os
from typing import Dict, List, Optional, Sequence

from ..settings import get_data_dir

# Whisper exports name their files "<size>-encoder.onnx" etc.
WHISPER_SUFFIXES: Dict[str, Sequence[str]] = {
    "encoder": ("-encoder.onnx", "-encoder.int8.onnx"),
    "decoder": ("-decoder.onnx", "-decoder.int8.onnx"),
    "tokens": ("-tokens.txt", "tokens.txt"),
}
TRANSDUCER_PARTS = ("encoder", "decoder", "joiner")


def get_models_dir() -> str:
    return str(get_data_dir() / "models")


def resolve_model_path(model_id_or_path: str) -> tuple[str, str]:
    """Return (model_id, absolute model directory) for an id or a path."""
    if os.path.isabs(model_id_or_path):
        return os.path.basename(model_id_or_path.rstrip(os.sep)), model_id_or_path
    return model_id_or_path, os.path.join(get_models_dir(), model_id_or_path)


def _list_dir(directory: str) -> List[str]:
    try:
        return sorted(os.listdir(directory))
    except OSError:
        return []


def find_file_by_suffix(directory: str, *suffixes: str) -> Optional[str]:
    for filename in _list_dir(directory):
        if filename.endswith(suffixes):
            return os.path.join(directory, filename)
    return None


def find_file_by_prefix(directory: str, prefix: str, suffix: str) -> Optional[str]:
    """Find e.g. 'encoder-epoch-99-avg-1.onnx', preferring full precision files."""
    matches = [
        name
        for name in _list_dir(directory)
        if name.startswith(prefix) and name.endswith(suffix)
    ]
    if not matches:
        return None
    full_precision = [name for name in matches if ".int8." not in name]
    return os.path.join(directory, (full_precision or matches)[0])


def find_file_exact(directory: str, candidates: Sequence[str]) -> Optional[str]:
    for name in candidates:
        path = os.path.join(directory, name)
        if os.path.exists(path):
            return path
    return None


def transducer_file_names(part: str) -> List[str]:
    return [f"{part}.onnx", f"{part}.int8.onnx", f"{part}.fp16.onnx"]


def find_whisper_files(model_path: str) -> Dict[str, Optional[str]]:
    return {
        name: find_file_by_suffix(model_path, *suffixes)
        for name, suffixes in WHISPER_SUFFIXES.items()
    }


def find_transducer_files(model_path: str) -> Dict[str, Optional[str]]:
    files = {
        part: find_file_exact(model_path, transducer_file_names(part))
        for part in TRANSDUCER_PARTS
    }
    files["tokens"] = find_file_exact(model_path, ["tokens.txt"])
    return files


def find_streaming_files(model_path: str) -> Dict[str, Optional[str]]:
    # Streaming zipformer exports carry the training epoch in their names
    files = {
        part: find_file_by_prefix(model_path, part, ".onnx")
        for part in TRANSDUCER_PARTS
    }
    files["tokens"] = find_file_exact(model_path, ["tokens.txt"])
    return files


MODEL_FILE_FINDERS = {
    "whisper": find_whisper_files,
    "transducer": find_transducer_files,
    "streaming-transducer": find_streaming_files,
}


def find_model_files(model_path: str, model_type: str) -> Dict[str, Optional[str]]:
    finder = MODEL_FILE_FINDERS.get(model_type, find_transducer_files)
    return finder(model_path)


def is_valid_model_dir(model_path: str, model_type: str) -> bool:
    if not os.path.isdir(model_path):
        return False
    return all(find_model_files(model_path, model_type).values())
