from __future__ import annotations

import json
import logging
import threading
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Callable, Dict, List, Optional

from beam_statics.domain.beam import Beam
from beam_statics.services.serialization import (
    SerializationError, beam_from_dict, beam_to_dict,
)

logger = logging.getLogger(__name__)

APP_VERSION = "1.0.0"
AUTO_SAVE_NAME = "_autosave"


@dataclass(frozen=True)
class ProjectMetadata:
    created: datetime
    modified: datetime
    version: str = APP_VERSION
    engineer: str = ""
    company: str = ""
    description: str = ""


@dataclass(frozen=True)
class SavedProject:
    id: str
    name: str
    beam: Beam
    metadata: ProjectMetadata


@dataclass(frozen=True)
class StorageStats:
    total_projects: int
    storage_used: int                  # bytes
    oldest_project: Optional[datetime] = None
    newest_project: Optional[datetime] = None


class ProjectStore:
    """
    Proyectos con nombre guardados como un JSON por proyecto en `root_dir`,
    con el id como nombre de archivo.
    Guardar con un nombre existente conserva id y fecha de creación.
    """

    def __init__(self, root_dir: str | Path):
        self.root = Path(root_dir)
        self.root.mkdir(parents=True, exist_ok=True)

    # ---------- lectura ----------
    def _files(self) -> List[Path]:
        return sorted(p for p in self.root.glob("*.json") if p.stem != AUTO_SAVE_NAME)

    def _read(self, path: Path) -> SavedProject:
        try:
            d = json.loads(path.read_text(encoding="utf-8"))
            meta = d["metadata"]
            return SavedProject(
                id=str(d["id"]),
                name=str(d["name"]),
                beam=beam_from_dict(d["beam"]),
                metadata=ProjectMetadata(
                    created=datetime.fromisoformat(meta["created"]),
                    modified=datetime.fromisoformat(meta["modified"]),
                    version=meta.get("version", APP_VERSION),
                    engineer=meta.get("engineer", ""),
                    company=meta.get("company", ""),
                    description=meta.get("description", ""),
                ),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise SerializationError(f"Proyecto inválido en {path}: {e}") from e

    def _file_for(self, project_id: str) -> Path:
        return self.root / f"{project_id}.json"

    def _write(self, project: SavedProject) -> Path:
        m = project.metadata
        data = {
            "id": project.id,
            "name": project.name,
            "beam": beam_to_dict(project.beam),
            "metadata": {
                "created": m.created.isoformat(),
                "modified": m.modified.isoformat(),
                "version": m.version,
                "engineer": m.engineer,
                "company": m.company,
                "description": m.description,
            },
        }
        path = self._file_for(project.id)
        # escritura atómica vía .tmp
        tmp = path.with_name(path.name + ".tmp")
        tmp.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")
        tmp.replace(path)
        return path

    def _path_of(self, project_id: str) -> Optional[Path]:
        for p in self._files():
            try:
                if self._read(p).id == project_id:
                    return p
            except SerializationError as e:
                logger.warning("Proyecto ilegible ignorado: %s", e)
        return None

    def list_projects(self) -> List[SavedProject]:
        """Todos los proyectos, más reciente primero. Archivos corruptos se omiten."""
        out: List[SavedProject] = []
        for p in self._files():
            try:
                out.append(self._read(p))
            except SerializationError as e:
                logger.warning("Proyecto ilegible ignorado: %s", e)
        out.sort(key=lambda pr: pr.metadata.modified, reverse=True)
        return out

    def find_by_name(self, name: str) -> Optional[SavedProject]:
        for pr in self.list_projects():
            if pr.name == name:
                return pr
        return None

    def load(self, project_id: str) -> Optional[SavedProject]:
        p = self._path_of(project_id)
        return None if p is None else self._read(p)

    # ---------- escritura ----------
    def save(
        self,
        beam: Beam,
        name: str,
        *,
        engineer: str = "",
        company: str = "",
        description: str = "",
        now: Optional[datetime] = None,
    ) -> SavedProject:
        now = now or datetime.now()
        existing = self.find_by_name(name)
        project = SavedProject(
            id=existing.id if existing else uuid.uuid4().hex[:12],
            name=name,
            beam=beam,
            metadata=ProjectMetadata(
                created=existing.metadata.created if existing else now,
                modified=now,
                engineer=engineer,
                company=company,
                description=description,
            ),
        )
        self._write(project)
        logger.info("Proyecto guardado: %s (%s)", name, project.id)
        return project

    def delete(self, project_id: str) -> bool:
        p = self._path_of(project_id)
        if p is None:
            return False
        p.unlink()
        logger.info("Proyecto borrado: %s", project_id)
        return True

    def rename(self, project_id: str, new_name: str) -> Optional[SavedProject]:
        p = self._path_of(project_id)
        if p is None:
            return None
        old = self._read(p)
        renamed = SavedProject(
            id=old.id,
            name=new_name,
            beam=old.beam,
            metadata=ProjectMetadata(
                created=old.metadata.created,
                modified=datetime.now(),
                version=old.metadata.version,
                engineer=old.metadata.engineer,
                company=old.metadata.company,
                description=old.metadata.description,
            ),
        )
        if self._write(renamed) != p:
            p.unlink()
        return renamed

    def stats(self) -> StorageStats:
        projects = self.list_projects()
        used = sum(p.stat().st_size for p in self._files())
        dates = [pr.metadata.created for pr in projects]
        return StorageStats(
            total_projects=len(projects),
            storage_used=used,
            oldest_project=min(dates) if dates else None,
            newest_project=max(dates) if dates else None,
        )

    # ---------- autoguardado ----------
    @property
    def autosave_path(self) -> Path:
        return self.root / f"{AUTO_SAVE_NAME}.json"

    def write_autosave(self, beam: Beam) -> None:
        data = {"beam": beam_to_dict(beam), "timestamp": datetime.now().isoformat()}
        self.autosave_path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        logger.debug("Autoguardado en %s", self.autosave_path)

    def read_autosave(self) -> Optional[Dict[str, object]]:
        if not self.autosave_path.exists():
            return None
        try:
            d = json.loads(self.autosave_path.read_text(encoding="utf-8"))
            return {"beam": beam_from_dict(d["beam"]), "timestamp": datetime.fromisoformat(d["timestamp"])}
        except (KeyError, TypeError, ValueError) as e:
            logger.error("Autoguardado ilegible: %s", e)
            return None

    def clear_autosave(self) -> None:
        if self.autosave_path.exists():
            self.autosave_path.unlink()


@dataclass
class AutoSaver:
    """
    Autoguardado con debounce: cada schedule() reinicia el temporizador; sólo el
    último estado se escribe tras `delay` segundos. cancel() lo descarta.
    """
    save_fn: Callable[[Beam], None]
    delay: float = 2.0
    _timer: Optional[threading.Timer] = field(default=None, init=False, repr=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False)

    def schedule(self, beam: Beam) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._timer = threading.Timer(self.delay, self._fire, args=(beam,))
            self._timer.daemon = True
            self._timer.start()

    def _fire(self, beam: Beam) -> None:
        with self._lock:
            # un schedule() posterior ya pudo instalar otro temporizador
            if self._timer is threading.current_thread():
                self._timer = None
        self.save_fn(beam)

    def cancel(self) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None

    @property
    def pending(self) -> bool:
        return self._timer is not None
