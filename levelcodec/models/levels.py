import datetime

from levelcodec.webapp import db


class LevelsBlob(db.Model):
    """Per-owner levels payload, stored verbatim.

    The payload is whatever JSON the client posted (chunked levels file or a
    legacy dense list). It is never interpreted on write; the decode boundary
    only runs when a caller asks for the expanded form.
    """

    __tablename__ = "levels_blobs"
    id = db.Column(db.Integer, primary_key=True)
    owner = db.Column(db.String(120), unique=True, nullable=False, index=True)
    payload = db.Column(db.Text, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.datetime.utcnow, onupdate=datetime.datetime.utcnow)

    @staticmethod
    def get(owner: str):
        row = LevelsBlob.query.filter_by(owner=owner).first()
        return row.payload if row else None

    @staticmethod
    def put(owner: str, payload: str):
        row = LevelsBlob.query.filter_by(owner=owner).first()
        if not row:
            row = LevelsBlob(owner=owner, payload=payload)
            db.session.add(row)
        else:
            row.payload = payload
        db.session.commit()
        return row

    def __repr__(self):
        return f"<LevelsBlob {self.id} owner={self.owner} bytes={len(self.payload or '')}>"
