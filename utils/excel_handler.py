"""
Excel处理工具类
用于导出赛事报名名单和比赛成绩排名
"""

from io import BytesIO

import pandas as pd


class ExcelHandler:
    def __init__(self):
        self.side_labels = {
            'left': '左',
            'right': '右',
        }

    def _write(self, frames, column_widths=None):
        """把 {工作表名: DataFrame} 写入 xlsx 并返回字节内容"""
        output = BytesIO()
        with pd.ExcelWriter(output, engine='openpyxl') as writer:
            for sheet_name, df in frames.items():
                df.to_excel(writer, sheet_name=sheet_name, index=False)
                worksheet = writer.sheets[sheet_name]
                for col, width in (column_widths or {}).items():
                    worksheet.column_dimensions[col].width = width
        output.seek(0)
        return output.getvalue()

    def standings_frame(self, standings, rounds):
        """成绩排名表：名次、姓名、各轮渔获、总计"""
        rows = []
        for rank, item in enumerate(standings, 1):
            row = {
                '名次': rank,
                '用户ID': item['user_id'],
                '姓名': item['name'],
            }
            for round_number in range(1, rounds + 1):
                row[f'第{round_number}轮'] = item['catches'].get(round_number, 0)
            row['总计'] = item['total']
            rows.append(row)

        columns = ['名次', '用户ID', '姓名'] + [f'第{n}轮' for n in range(1, rounds + 1)] + ['总计']
        return pd.DataFrame(rows, columns=columns)

    def export_standings(self, event, standings):
        """导出成绩排名"""
        rounds = max([r.round_number for r in event.rounds] or [0])
        df = self.standings_frame(standings, rounds)
        return self._write({'成绩排名': df}, column_widths={'C': 20})

    def export_participants(self, event, participants):
        """导出报名名单（含当前钓位）"""
        rows = []
        for item in participants:
            assignment = event.participant_spots.get(item['id'])
            rows.append({
                '用户ID': item['id'],
                '姓名': item['name'],
                '邮箱': item['email'],
                '电话': item['phone'],
                '支付方式': item['payment_method'],
                '已缴费': '是' if item['paid'] else '否',
                '钓位': assignment.spot if assignment else '',
                '位置': self.side_labels.get(assignment.side.value, '') if assignment else '',
            })
        columns = ['用户ID', '姓名', '邮箱', '电话', '支付方式', '已缴费', '钓位', '位置']
        df = pd.DataFrame(rows, columns=columns)
        return self._write({'报名名单': df}, column_widths={'B': 20, 'C': 28, 'D': 18})


excel_handler = ExcelHandler()
