# Services module for Barcode Grader
# Contains the stage services and the pipeline that chains them

# Stage services are in services/impl/
# Import them directly from there:
# from services.impl.s1_frame_ingest_service import S1FrameIngestService
# from services.impl.s5_quality_grader_service import S5QualityGraderService
# etc.

__all__ = []
