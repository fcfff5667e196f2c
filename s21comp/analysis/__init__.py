"""Analysis: reflection-loss compensation of S21 sweeps."""

from .compensation import CompensationResult, ReferenceNotFoundError, compensate, loss_db
