"""Certificate ingestion: infer building descriptions from EPC records."""

from .epc_mapper import (
    CertificateRecord,
    InferenceReport,
    ParameterInferenceMapper,
    region_from_postcode,
)

__all__ = [
    "CertificateRecord",
    "InferenceReport",
    "ParameterInferenceMapper",
    "region_from_postcode",
]
